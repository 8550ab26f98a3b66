import logging
import time
from typing import Any, Callable, Dict, Mapping, Optional

from core.config import config

logger = logging.getLogger(__name__)

Errors = Dict[str, str]
Validator = Callable[[Dict[str, Any]], Mapping[str, str]]
SubmitCallback = Callable[[Dict[str, Any]], Any]


class FormState:
    """State for a controlled-input form.

    Holds the current field values, per-field validation errors, and the
    submitting / success flags. Not tied to any particular form; the caller
    supplies the initial values, a validator and the submit callback.

    ``success`` turns on after a successful submit and turns itself off once
    ``success_seconds`` have passed on ``clock``.
    """

    def __init__(
        self,
        initial_values: Mapping[str, Any],
        validator: Validator,
        on_submit: SubmitCallback,
        success_seconds: Optional[float] = None,
        clock: Callable[[], float] = time.monotonic,
    ):
        self._initial = dict(initial_values)
        self._validator = validator
        self._on_submit = on_submit
        self._success_seconds = config.SUCCESS_MESSAGE_SECONDS if success_seconds is None else success_seconds
        self._clock = clock

        self.values: Dict[str, Any] = dict(self._initial)
        self.errors: Errors = {}
        self.submitting = False
        self.submit_error: Optional[str] = None
        self._success_until: Optional[float] = None

    @property
    def success(self) -> bool:
        if self._success_until is None:
            return False
        if self._clock() >= self._success_until:
            self._success_until = None
            return False
        return True

    def set_field(self, name: str, value: Any):
        self.values[name] = value
        # Re-validated on submit, not on edit
        self.errors.pop(name, None)

    def validate(self) -> bool:
        self.errors = dict(self._validator(dict(self.values)))
        return not self.errors

    def submit(self) -> bool:
        """Validate and, if clean, hand the values to the submit callback.

        Returns True when the callback completed. A callback exception is
        logged and its message kept in ``submit_error``; the entered values
        are left in place so the user can retry.
        """
        if not self.validate():
            return False

        self.submitting = True
        self.submit_error = None
        self._success_until = None
        try:
            self._on_submit(dict(self.values))
        except Exception as exc:
            logger.exception("Form submission failed")
            self.submit_error = str(exc) or exc.__class__.__name__
            return False
        finally:
            self.submitting = False

        self.values = dict(self._initial)
        self._success_until = self._clock() + self._success_seconds
        return True

    def reset(self):
        self.values = dict(self._initial)
        self.errors = {}
        self.submitting = False
        self.submit_error = None
        self._success_until = None
