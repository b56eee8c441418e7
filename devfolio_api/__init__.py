"""DevFolio API: portfolio and career-tracking backend with AI-assisted content."""

__version__ = "0.3.0"
