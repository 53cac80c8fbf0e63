"""
LaundryPro client core: session lifecycle and data synchronization for the
LaundryPro mobile app.
"""
from laundrypro.core.container import AppContainer

__version__ = "1.0.0"

__all__ = ["AppContainer", "__version__"]
