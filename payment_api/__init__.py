"""Payment Transaction Service.

This service provides APIs to:
- Authorize new card payments
- Reverse (void) previously authorized payments
- Look up a single transaction or list all transactions
"""

__version__ = "0.1.0"
