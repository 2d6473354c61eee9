"""Handlers for the "unpause a signature workflow" example.

Both handlers are plain functions of a :class:`RequestContext` and return a
:class:`Render` or :class:`Redirect`; the Flask routes in ``app.app`` turn
those into responses.
"""
import logging
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, MutableMapping, Union

from app.service_auth import DsAuth
from app.service_esign import ApiException, unpause_workflow


logger = logging.getLogger(__name__)

EG = "eg033"
SOURCE_FILE = "handlers.py"
MUST_AUTHENTICATE = "/ds/mustAuthenticate"
MINIMUM_BUFFER_MIN = 3


@dataclass
class Render:
    template: str
    context: Dict[str, Any] = field(default_factory=dict)


@dataclass
class Redirect:
    location: str


Outcome = Union[Render, Redirect]


@dataclass
class RequestContext:
    session: MutableMapping
    auth: DsAuth
    flash: Callable[[str, str], None]
    csrf_token: str = ""
    github_example_url: str = ""
    documentation_url: str = ""


def render_form(ctx: RequestContext) -> Outcome:
    # Best moment to ask for a login: nothing has been typed into the form yet.
    if not ctx.auth.check_token():
        ctx.auth.set_eg(EG)
        return Redirect(MUST_AUTHENTICATE)

    return Render(
        "pages/examples/eg033.html",
        {
            "eg": EG,
            "csrf_token": ctx.csrf_token,
            "title": "Unpausing a signature workflow",
            "envelope_ok": "pausedEnvelopeId" in ctx.session,
            "source_file": SOURCE_FILE,
            "source_url": ctx.github_example_url + SOURCE_FILE if ctx.github_example_url else "",
            "documentation": ctx.documentation_url + EG,
            "show_doc": ctx.documentation_url,
        },
    )


def resume_workflow(ctx: RequestContext, worker=unpause_workflow) -> Outcome:
    if not ctx.auth.check_token(MINIMUM_BUFFER_MIN):
        ctx.flash("Sorry, you need to re-authenticate.", "info")
        ctx.auth.set_eg(EG)
        return Redirect(MUST_AUTHENTICATE)

    if not ctx.session.get("pausedEnvelopeId"):
        ctx.flash("There is no paused envelope to resume. Run the pause example first.", "warning")
        return Redirect("/" + EG)

    args = {
        "access_token": ctx.auth.access_token,
        "base_path": ctx.session.get("basePath", ""),
        "account_id": ctx.session.get("accountId", ""),
        "envelope_id": ctx.session["pausedEnvelopeId"],
    }

    try:
        results = worker(args)
    except ApiException as exc:
        body = exc.body if isinstance(exc.body, dict) else {}
        logger.warning("Unpausing envelope %s failed: %s", args["envelope_id"], exc)
        return Render(
            "pages/error.html",
            {
                "err": exc,
                "error_code": body.get("errorCode"),
                "error_message": body.get("message"),
            },
        )

    logger.info("Envelope %s unpaused", results["envelope_id"])
    return Render(
        "pages/example_done.html",
        {
            "title": "Envelope unpaused",
            "h1": "Envelope unpaused",
            "envelope_ok": True,
            "envelope_id": results["envelope_id"],
            "message": "The envelope workflow has been resumed and the envelope has been sent to a second recipient!",
        },
    )
