"""A table-driven state machine, a formatting logging core and SONAR attribute/error types."""

__version__ = "0.1.0"
__all__ = ["fsm", "log", "sonar_types"]