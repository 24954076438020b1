"""Order management sample: aggregate, fetch strategies and read-model projections."""

__version__ = "0.1.0"
