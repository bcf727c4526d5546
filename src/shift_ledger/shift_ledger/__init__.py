"""Shift Ledger package.

Organized by feature modules (attendance, requests, summary, payroll, ...)
with a thin Flask JSON controller layer over service/repository layers.
"""
