"""Building blocks of a small relational database engine: values, errors, result printing, transactions and locking."""

__version__ = "0.1.0"