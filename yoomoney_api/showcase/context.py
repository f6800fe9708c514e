"""Showcase wizard: step-by-step submission of a showcase form.

The server owns the form graph. Each submission of the current step answers
with one of:

- 200: final payment parameters, the wizard is completed;
- 300: the next form, the current step is pushed to history;
- 400: the same step with corrections, the current step is replaced;
- 404: ``ResourceNotFoundError``;
- anything else: ``ProtocolError``.
"""

import logging
from datetime import datetime
from typing import Dict, List, Optional
from urllib.parse import urljoin

import httpx
from pydantic import BaseModel, ConfigDict

from ..net import BaseApiRequest, Method, process_error, request_url, parse_date_header, utc_now
from ..types import (
    HostsProvider,
    HttpHeaders,
    ProtocolError,
    ResourceNotFoundError,
    ShowcaseState
)
from .showcase import Showcase, parse_params


logger = logging.getLogger(__name__)


class Step(BaseModel):
    """Form of one wizard step and the URL its parameters are submitted to."""
    model_config = ConfigDict(frozen=True)

    showcase: Optional[Showcase] = None
    submit_url: Optional[str] = None


class ShowcaseContext:
    """Mutable state of a showcase wizard.

    The context exclusively owns its history and current step; they change
    only through ``pop_step`` and the parsing of a submission response.

    Example:
        context = await client.execute(ShowcaseRequest(pattern_id="337"))
        # ... let the user fill context.current_step.showcase.form ...
        while context.state != ShowcaseState.COMPLETED:
            context = await client.execute(context.create_request())
        params = context.params
    """

    def __init__(
        self,
        history: Optional[List[Step]] = None,
        last_modified: Optional[datetime] = None,
        current_step: Optional[Step] = None,
        params: Optional[Dict[str, str]] = None,
        state: ShowcaseState = ShowcaseState.UNKNOWN
    ):
        """Initialize context.

        Args:
            history: Previously current steps, oldest first
            last_modified: Time of the last showcase change on the server
            current_step: Step to submit next
            params: Final payment parameters of a completed wizard
            state: Outcome of the last operation
        """
        self._history: List[Step] = list(history or [])
        self._last_modified = last_modified or utc_now()
        self._current_step = current_step
        self._params: Dict[str, str] = dict(params or {})
        self._state = state

    @classmethod
    def from_showcase(
        cls,
        showcase: Showcase,
        submit_url: str,
        last_modified: Optional[datetime] = None
    ) -> "ShowcaseContext":
        return cls(last_modified=last_modified, current_step=Step(showcase=showcase, submit_url=submit_url))

    @classmethod
    def not_modified(cls, last_modified: Optional[datetime] = None) -> "ShowcaseContext":
        """Context for a showcase the server reported unchanged."""
        return cls(last_modified=last_modified, state=ShowcaseState.NOT_MODIFIED)

    @property
    def history(self) -> List[Step]:
        return list(self._history)

    @property
    def history_size(self) -> int:
        return len(self._history)

    @property
    def current_step(self) -> Optional[Step]:
        return self._current_step

    @property
    def last_modified(self) -> datetime:
        return self._last_modified

    @property
    def params(self) -> Dict[str, str]:
        """Final payment parameters; empty until the wizard is completed."""
        return dict(self._params)

    @property
    def state(self) -> ShowcaseState:
        return self._state

    def create_request(self) -> "ShowcaseSubmitRequest":
        """Request submitting the current step's parameters."""
        return ShowcaseSubmitRequest(self)

    def pop_step(self) -> Optional[Step]:
        """Goes one step back.

        A completed context only drops its final parameters and returns to
        ``HAS_NEXT_STEP``, keeping the current step and history. Otherwise the
        most recent step in history becomes current. With nothing to undo the
        context is left as is.

        Returns:
            Current step after the operation
        """
        if self._params:
            logger.info("Dropping final parameters of completed showcase")
            self._params = {}
            self._state = ShowcaseState.HAS_NEXT_STEP
        elif self._history:
            self._current_step = self._history.pop()
            logger.info(f"Returned to step {self._current_step.submit_url}, history size {len(self._history)}")
        return self._current_step

    def _complete(self, params: Dict[str, str]) -> None:
        self._params = dict(params)
        self._state = ShowcaseState.COMPLETED

    def _push_step(self, step: Step) -> None:
        if self._current_step is not None:
            self._history.append(self._current_step)
        self._current_step = step
        self._state = ShowcaseState.HAS_NEXT_STEP

    def _replace_step(self, step: Step) -> None:
        self._current_step = step
        self._state = ShowcaseState.INVALID_PARAMS

    def __eq__(self, other) -> bool:
        if not isinstance(other, ShowcaseContext):
            return NotImplemented
        return self._history == other._history and \
            self._last_modified == other._last_modified and \
            self._current_step == other._current_step and \
            self._params == other._params and \
            self._state == other._state

    def __repr__(self) -> str:
        return (
            f"ShowcaseContext(state={self._state.value}, history_size={len(self._history)}, "
            f"current_step={self._current_step!r}, params={self._params!r})"
        )


def _location(response: httpx.Response, fallback: Optional[str]) -> Optional[str]:
    location = response.headers.get(HttpHeaders.LOCATION)
    if not location:
        return fallback
    base = request_url(response)
    return urljoin(base, location) if base else location


class ShowcaseSubmitRequest(BaseApiRequest[ShowcaseContext]):
    """POST of the current step's parameters; ``parse`` advances the context."""

    def __init__(self, context: ShowcaseContext):
        super().__init__()
        step = context.current_step
        if step is None or step.showcase is None:
            raise ValueError("context has no current showcase to submit")
        if not step.submit_url:
            raise ValueError("current step has no submit URL")
        self.context = context
        self.submit_url = step.submit_url
        self.add_header(HttpHeaders.IF_MODIFIED_SINCE, context.last_modified)
        self.add_parameters(step.showcase.payment_parameters())

    @property
    def method(self) -> Method:
        return Method.POST

    def request_url_base(self, hosts: HostsProvider) -> str:
        return self.submit_url

    def parse(self, response: httpx.Response) -> ShowcaseContext:
        code = response.status_code
        if code == 200:
            params = parse_params(response.content)
            self.context._complete(params)
            logger.info(f"Showcase completed with {len(params)} parameters")
            return self.context
        if code in (300, 400):
            step = Step(
                showcase=Showcase.model_validate_json(response.content),
                submit_url=_location(response, self.submit_url)
            )
            if code == 300:
                self.context._push_step(step)
                logger.info(f"Showcase has next step {step.submit_url}, history size {self.context.history_size}")
            else:
                self.context._replace_step(step)
                logger.info(f"Showcase rejected parameters, corrected step {step.submit_url}")
            return self.context
        if code == 404:
            raise ResourceNotFoundError(request_url(response))
        logger.warning(f"Unexpected showcase response code {code}")
        raise ProtocolError(
            process_error(response),
            status_code=code,
            url=request_url(response),
            payload=response.text or None
        )


class ShowcaseRequest(BaseApiRequest[ShowcaseContext]):
    """GET of a showcase by pattern id or URL, starting a new wizard.

    The server answers 300 with the form and its submit URL in ``Location``
    (200 is accepted as well), or 304 when ``last_modified`` is still current.
    """

    def __init__(
        self,
        pattern_id: Optional[str] = None,
        url: Optional[str] = None,
        last_modified: Optional[datetime] = None
    ):
        super().__init__()
        if bool(pattern_id) == bool(url):
            raise ValueError("exactly one of pattern_id and url is required")
        self.pattern_id = pattern_id
        self.url = url
        self.last_modified = last_modified
        self.add_header(HttpHeaders.IF_MODIFIED_SINCE, last_modified)

    @property
    def method(self) -> Method:
        return Method.GET

    def request_url_base(self, hosts: HostsProvider) -> str:
        if self.url:
            return self.url
        return f"{hosts.money_api}/showcase/{self.pattern_id}"

    def parse(self, response: httpx.Response) -> ShowcaseContext:
        code = response.status_code
        last_modified = parse_date_header(response, HttpHeaders.LAST_MODIFIED)
        if code in (200, 300):
            showcase = Showcase.model_validate_json(response.content)
            submit_url = _location(response, request_url(response) or self.url)
            logger.info(f"Loaded showcase {showcase.title!r}, submit to {submit_url}")
            return ShowcaseContext.from_showcase(showcase, submit_url, last_modified)
        if code == 304:
            return ShowcaseContext.not_modified(last_modified or self.last_modified)
        if code == 404:
            raise ResourceNotFoundError(request_url(response))
        logger.warning(f"Unexpected showcase response code {code}")
        raise ProtocolError(
            process_error(response),
            status_code=code,
            url=request_url(response),
            payload=response.text or None
        )
