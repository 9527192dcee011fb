# This project was developed with assistance from AI tools.
"""HelbFlow API -- student loan disbursement, budgeting and repayment tracking."""

__version__ = "0.1.0"
