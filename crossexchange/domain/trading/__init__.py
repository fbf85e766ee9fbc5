"""
Trading bounded context, domain layer.

This module contains all domain logic for the trading context:
- Share price quotes
- Portfolios and their trade history
- BUY/SELL trade pricing and holding rules
"""
