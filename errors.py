"""
Exception classes for the mortgage strategy simulator.
"""


class ParameterError(ValueError):
    """
    Invalid simulation input.

    Raised while validating a parameter set, before any random number is
    drawn. The message names the offending field, e.g.
    ``"n_simulations must be a positive integer, got 0"``.
    """


class SimulationResourceError(MemoryError):
    """
    The run did not fit in memory.

    Raised instead of returning truncated results when the path matrix or
    the per-strategy cost arrays cannot be allocated for the requested
    number of simulations and horizon.
    """
