"""NPV rate-sweep calculator: NPV of a cash-flow series across a range of discount rates."""

__version__ = "1.0.0"
