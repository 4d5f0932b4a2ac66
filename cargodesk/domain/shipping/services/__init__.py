from .rate_calculator import RateCalculator, RateQuote
from .tracking_history_generator import TrackingHistoryGenerator, status_path

__all__ = ["RateCalculator", "RateQuote", "TrackingHistoryGenerator", "status_path"]
