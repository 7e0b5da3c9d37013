"""Event-driven application state around the valuation engine."""
