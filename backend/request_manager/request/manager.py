"""Request Manager — validates one request's content against a RequestRule.

This is the main entry point for controllers. One manager is built per
request; it parses the body once, keeps an untouched copy of it, and lets
rules and hooks work on a separate working copy.

Usage:
    manager = RequestManager(request_data)
    content = manager.validate(CreateUserRule())
    user_id = manager.get_from_bag("user_id")
"""

import copy
import time
from typing import Any, Callable, NoReturn, Optional, Sequence, Union

import structlog
from fastapi import HTTPException

from request_manager import property_path
from request_manager.config import Settings, get_settings
from request_manager.constraints.composite import ConstraintList
from request_manager.constraints.validator import ConstraintValidator, constraint_validator
from request_manager.exceptions import BagKeyNotFoundError, InvalidProcessorError, SmartProblemException
from request_manager.models.problem import ProblemType, SmartProblem
from request_manager.request.content import RequestData, parse_request_content
from request_manager.request.rule import FieldRule, RequestRule

logger = structlog.get_logger()

UNDEFINED_PARAMETERS_TITLE = "Undefined parameters were found in the request structure."
MISSING_PARAMETER_TITLE = "Required parameter was not found in the request structure."
VALIDATION_ERROR_TITLE = "There was a validation error."


class RequestManager:
    """Validates request content in two passes and exposes the outcome.

    Pass one checks the content against the rule's validation map:
    undefined fields and missing fields fail straight away, constraint
    violations are collected across all fields (first violation per field)
    and reported together. Pass two runs only when pass one succeeds and
    dispatches the rule's end hook, field hooks, callbacks and processors.
    """

    def __init__(
        self,
        request: RequestData,
        validator: Optional[ConstraintValidator] = None,
        is_debug: Optional[bool] = None,
        settings: Optional[Settings] = None,
    ):
        """Parse the request content.

        Args:
            request: Snapshot of the current request
            validator: Constraint validator. Defaults to the module singleton.
            is_debug: Report field-level details for undefined/missing
                parameters. Defaults to the DEBUG setting.
            settings: Optional settings override. Defaults to environment settings.

        Raises:
            SmartProblemException: invalid_body_format for a malformed JSON body
        """
        self._request = request
        self._validator = validator or constraint_validator
        settings = settings or get_settings()
        self._is_debug = settings.DEBUG if is_debug is None else is_debug
        self._request_rule: Optional[RequestRule] = None
        self._callbacks: dict[str, Callable[[], Any]] = {}
        self._validation_errors: dict[str, Any] = {}
        self._bag: dict[str, Any] = {}

        content = parse_request_content(request, settings)
        self._original_content = copy.deepcopy(content)
        self._request_content = content

        logger.debug("request_content_parsed", method=request.method, fields=list(content))

    # ── Validation ──

    def validate(self, rule: RequestRule, skip_missing: bool = False) -> dict[str, Any]:
        """Validate the working content against a rule.

        Args:
            rule: Rule providing the validation map and lifecycle hooks
            skip_missing: Ignore fields of the map that are absent from the
                content instead of failing

        Returns:
            The working content after all hooks and processors ran

        Raises:
            SmartProblemException: undefined_parameters,
                missing_required_parameter (debug mode) or validation_error
            HTTPException: 400 for undefined/missing parameters outside debug mode
            InvalidProcessorError: a declared processor is not callable
        """
        start_time = time.perf_counter()
        self._request_rule = rule
        self._validation_errors = {}

        logger.debug("validation_started", rule=type(rule).__name__, skip_missing=skip_missing)

        rule.on_validation_start(self)

        validation_map = rule.get_validation_map()
        request_content = self._request_content

        undefined = [key for key in request_content if key not in validation_map]
        if undefined:
            logger.info("undefined_parameters_found", rule=type(rule).__name__, fields=undefined)
            self._raise_parameter_problem(ProblemType.UNDEFINED_PARAMETERS, UNDEFINED_PARAMETERS_TITLE, undefined)

        for key, entry in validation_map.items():
            if key not in request_content:
                if skip_missing:
                    continue
                logger.info("required_parameter_missing", rule=type(rule).__name__, field=key)
                self._raise_parameter_problem(ProblemType.MISSING_REQUIRED_PARAMETER, MISSING_PARAMETER_TITLE, key)

            field_rule = FieldRule.coerce(entry)
            if not field_rule.constraints:
                continue

            violations = self._validator.validate(request_content[key], field_rule.constraints)
            if not violations:
                continue

            # Only the first violation per field is reported
            first = violations[0]
            if not first.property_path:
                self._validation_errors[key] = first.message
            else:
                self._validation_errors[key] = {}
                property_path.set_value(self._validation_errors[key], first.property_path, first.message)

        if self._validation_errors:
            logger.info(
                "validation_failed",
                rule=type(rule).__name__,
                error_count=len(self._validation_errors),
                fields=list(self._validation_errors),
                duration_ms=round((time.perf_counter() - start_time) * 1000, 2),
            )
            problem = SmartProblem(status=400, type=ProblemType.VALIDATION_ERROR, title=VALIDATION_ERROR_TITLE)
            problem.add_extra_data("errors", copy.deepcopy(self._validation_errors))
            raise SmartProblemException(problem)

        self._dispatch_extra_validation_methods()

        logger.info(
            "validation_passed",
            rule=type(rule).__name__,
            fields=list(self._request_content),
            duration_ms=round((time.perf_counter() - start_time) * 1000, 2),
        )

        return dict(self._request_content)

    def validate_manual(
        self,
        key: Union[str, Sequence[str]],
        constraints: ConstraintList,
        default: Any = None,
    ) -> Any:
        """Validate a single request parameter against one or more constraints.

        Reads from the request parameters (path, query, form), not from the
        parsed content, and never changes stored content.

        Args:
            key: Parameter name, or a (inner_key, outer_name) pair to read
                ``outer_name[inner_key]``
            constraints: The constraint(s) to check the value against
            default: Value used when the parameter is absent

        Returns:
            The validated value

        Raises:
            SmartProblemException: validation_error listing every violation message
            ValueError: key is a sequence that is not an (inner_key, outer_name) pair
        """
        if isinstance(key, str):
            error_key = key
            value = self._request.get(key, default)
        else:
            if len(key) != 2:
                raise ValueError(f"Nested parameter keys must be an (inner_key, outer_name) pair, got {key!r}")
            inner_key, outer_name = key
            error_key = "_".join(str(part) for part in key)
            value = default

            outer = self._request.get(outer_name)
            if isinstance(outer, dict) and inner_key in outer:
                value = outer[inner_key]

        violations = self._validator.validate(value, constraints)

        if violations:
            errors = {error_key: [violation.message for violation in violations]}
            logger.info("manual_validation_failed", field=error_key, violation_count=len(violations))

            problem = SmartProblem(status=400, type=ProblemType.VALIDATION_ERROR, title=VALIDATION_ERROR_TITLE)
            problem.add_extra_data("errors", errors)
            raise SmartProblemException(problem)

        return value

    def manipulate(self, key: str, value: Any) -> "RequestManager":
        """Add or replace a field of the working content."""
        self._request_content[key] = value
        return self

    # ── Bag ──

    def add_to_bag(self, key: str, value: Any) -> "RequestManager":
        self._bag[key] = value
        return self

    def get_from_bag(self, key: str) -> Any:
        if key not in self._bag:
            logger.debug("bag_key_not_found", key=key)
            raise BagKeyNotFoundError(key)
        return self._bag[key]

    def get_bag(self) -> dict[str, Any]:
        return self._bag

    def set_bag(self, bag: dict[str, Any]) -> "RequestManager":
        self._bag = bag
        return self

    # ── Callbacks ──

    def register_callback_before_dispatch(self, field_name: str, callback: Callable[[], Any]) -> "RequestManager":
        """Register a zero-argument callable run right before a field's hook."""
        if not callable(callback):
            raise SmartProblemException(
                SmartProblem(status=418, type=ProblemType.CALLBACK_NOT_CALLABLE, title="The callback is not callable.")
            )
        self._callbacks[field_name] = callback
        return self

    # ── Accessors ──

    @property
    def request(self) -> RequestData:
        return self._request

    @property
    def request_content(self) -> dict[str, Any]:
        """Working content, including every manipulation so far."""
        return self._request_content

    @property
    def original_content(self) -> dict[str, Any]:
        """Content as parsed from the request, never changed by manipulation."""
        return copy.deepcopy(self._original_content)

    @property
    def validation_errors(self) -> dict[str, Any]:
        return self._validation_errors

    @property
    def validator(self) -> ConstraintValidator:
        return self._validator

    @property
    def is_debug(self) -> bool:
        return self._is_debug

    # ── Internals ──

    def _raise_parameter_problem(self, kind: ProblemType, title: str, errors: Any) -> NoReturn:
        if not self._is_debug:
            raise HTTPException(status_code=400, detail=title)

        problem = SmartProblem(status=400, type=kind, title=title)
        problem.add_extra_data("errors", errors)
        raise SmartProblemException(problem)

    def _dispatch_extra_validation_methods(self) -> None:
        """Run the end hook, then field callbacks, hooks and processors."""
        rule = self._request_rule
        rule.on_validation_end(self)

        # The end hook may have changed the map
        validation_map = rule.get_validation_map()

        for key in list(self._request_content):
            hook = rule.get_field_hook(key)
            if hook is not None:
                callback = self._callbacks.get(key)
                if callback is not None:
                    callback()
                hook(self)

            entry = validation_map.get(key)
            processor = entry.get("processor") if isinstance(entry, dict) else getattr(entry, "processor", None)
            if processor is None:
                continue
            if not callable(processor):
                raise InvalidProcessorError(processor)
            processor(self)
