import hmac
import os
import secrets
from typing import Any, Dict, Optional

from flask import Flask, abort, flash, redirect, render_template, request, session
from flask_cors import CORS

from app.handlers import EG, Outcome, Redirect, RequestContext, render_form, resume_workflow
from app.service_auth import DsAuth
from app.service_esign import EnvelopesApi, unpause_workflow


DEFAULT_GITHUB_EXAMPLE_URL = ""
DEFAULT_DOCUMENTATION_URL = "https://developers.docusign.com/docs/esign-rest-api/how-to/"


def create_app(config: Optional[Dict[str, Any]] = None) -> Flask:
	app = Flask(__name__, static_folder="static", static_url_path="/static")
	CORS(app, resources={r"/*": {"origins": os.getenv("ALLOWED_ORIGINS", "*")}})

	app.secret_key = os.getenv("SESSION_SECRET", "eg033-dev-secret-key")
	app.config["GITHUB_EXAMPLE_URL"] = os.getenv("DS_GITHUB_EXAMPLE_URL", DEFAULT_GITHUB_EXAMPLE_URL)
	app.config["DOCUMENTATION_URL"] = os.getenv("DS_DOCUMENTATION_URL", DEFAULT_DOCUMENTATION_URL)
	app.config["DS_API_TIMEOUT"] = float(os.getenv("DS_API_TIMEOUT", "30"))
	if config:
		app.config.update(config)

	def csrf_token() -> str:
		if "csrf_token" not in session:
			session["csrf_token"] = secrets.token_urlsafe(32)
		return session["csrf_token"]

	def check_csrf() -> None:
		sent = request.form.get("_csrf", "")
		expected = session.get("csrf_token", "")
		if not sent or not expected or not hmac.compare_digest(sent, expected):
			abort(400, description="invalid CSRF token")

	def request_context() -> RequestContext:
		return RequestContext(
			session=session,
			auth=DsAuth(session),
			csrf_token=csrf_token(),
			github_example_url=app.config["GITHUB_EXAMPLE_URL"],
			documentation_url=app.config["DOCUMENTATION_URL"],
			flash=flash,
		)

	def respond(outcome: Outcome):
		if isinstance(outcome, Redirect):
			return redirect(outcome.location)
		return render_template(outcome.template, **outcome.context)

	def worker(args):
		return unpause_workflow(args, EnvelopesApi(timeout=app.config["DS_API_TIMEOUT"]))

	@app.get("/health")
	def health():
		return {"ok": True}

	@app.get("/")
	def index():
		return render_template("index.html", eg=EG, authenticated=DsAuth(session).check_token())

	@app.get("/ds/mustAuthenticate")
	def must_authenticate():
		return render_template("must_authenticate.html", eg=session.get("eg", ""))

	@app.get("/eg033")
	def eg033_form():
		return respond(render_form(request_context()))

	@app.post("/eg033")
	def eg033_submit():
		check_csrf()
		return respond(resume_workflow(request_context(), worker=worker))

	return app
