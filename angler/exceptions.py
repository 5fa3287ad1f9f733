"""Angler exception hierarchy.

Centralised base classes so callers can catch engine failures narrowly.
Every error here is a wiring or configuration defect; losing a fish is
ordinary data (the Lost phase plus a reason), never an exception.
"""


class AnglerError(Exception):
    """Root of all Angler domain exceptions."""


class ConfigurationError(AnglerError):
    """Invalid or missing configuration (species catalog, tuning values)."""


class StateMachineError(AnglerError):
    """Errors raised by the encounter state machine."""


class PhaseRegistrationError(StateMachineError):
    """A phase was registered twice, or registered without a behavior."""


class UnregisteredPhaseError(StateMachineError):
    """A phase with no registered behavior was referenced."""


class MachineNotInitializedError(StateMachineError):
    """The machine was updated before ``initialize`` was called."""


class MachineAlreadyInitializedError(StateMachineError):
    """``initialize`` was called on a machine that is already running."""
