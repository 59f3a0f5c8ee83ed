"""
                Carbon Trace API

Order tracking backend that records purchases together with the
carbon they saved, plus an AI prompt proxy with local fallbacks.
"""

__version__ = "1.0.0"
