"""slam - Screen Layout Manager.

Builds multi-monitor layouts through dmenu prompts, keeps them in a TOML
catalog and applies them with xrandr.
"""

__version__ = "0.1.0"
__license__ = "MIT"

__all__ = ["__version__", "__license__"]
