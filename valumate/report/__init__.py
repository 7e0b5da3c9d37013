'''
Presentation helpers for valuation results.

Pure consumers of ValuationResult: they format and plot, never compute.
'''
