"""
Livrili Finance - Retailer Credit & Receivables Calculations

Credit-limit checks, payment validation, receivable aging, payment
plans, late fees and credit risk scoring for the Livrili B2B
marketplace.
"""

__version__ = "0.1.0"
