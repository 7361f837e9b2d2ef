from __future__ import annotations


class MemristorSimError(Exception):
    """Base class for errors raised by memristor_sim."""


class InvalidModelKind(MemristorSimError, ValueError):
    def __init__(self, kind: object, known: list[str] | None = None):
        self.kind = kind
        self.known = list(known or [])
        msg = f"Unknown memristor model kind: {kind!r}"
        if self.known:
            msg += f" (expected one of: {', '.join(self.known)})"
        super().__init__(msg)


class InvalidModelParameters(MemristorSimError, ValueError):
    def __init__(self, kind: str, unknown: list[str], allowed: list[str]):
        self.kind = kind
        self.unknown = list(unknown)
        self.allowed = list(allowed)
        super().__init__(
            f"Unknown parameters for model '{kind}': {sorted(self.unknown)}. "
            f"Allowed: {self.allowed}"
        )


class NumericInstability(MemristorSimError, ArithmeticError):
    """
    Raised by the driver in strict mode when a current or state stops being finite.
    """

    def __init__(self, step: int, quantity: str, value: float):
        self.step = step
        self.quantity = quantity
        self.value = value
        super().__init__(f"Non-finite {quantity} at step {step}: {value!r}")
