"""
Command Line Interface Package

This package provides:
- Main CLI entry point (famfinance) with version and config commands
- famfinance budget: show and update monthly budgets
- famfinance report: income, balance-sheet, net-worth, cashflow, outflows, overview

Command Structure:
- famfinance budget show --family smiths --month 2024-03
- famfinance report outflows --family smiths --limit 5 --format csv
"""
