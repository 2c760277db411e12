"""NuGet Version Updater: rewrite NuGet package versions referenced by Visual Studio projects."""

__version__ = "1.0.0"
