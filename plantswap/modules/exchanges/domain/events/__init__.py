from .exchange_events import ExchangeStatusChanged

__all__ = ["ExchangeStatusChanged"]
