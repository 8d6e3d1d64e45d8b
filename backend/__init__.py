"""SmartMoney Analyzer backend."""
