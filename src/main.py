from __future__ import annotations

import logging
from typing import Any

from fastapi import FastAPI, File, Form, UploadFile
from fastapi.responses import JSONResponse

from pom_verifier import __version__
from pom_verifier.config import VerifierPolicy
from pom_verifier.exceptions import PomParseError, VersionParseError
from pom_verifier.messages import (
    INVALID_POM,
    MessageSet,
    VerificationMessage,
    has_required,
    sorted_messages,
)
from pom_verifier.models import SubmissionContext
from pom_verifier.parser import parse_manifest_bytes
from pom_verifier.verifier import MavenVerifier

logger = logging.getLogger(__name__)

app = FastAPI(title="POM Hosting Verifier", version=__version__)

_cached_policy: VerifierPolicy | None = None


def _policy() -> VerifierPolicy:
    """Policy from the environment, read once per process.

    Tests reset `_cached_policy` to pick up a changed environment.
    """
    global _cached_policy
    if _cached_policy is None:
        _cached_policy = VerifierPolicy.from_env()
    return _cached_policy


def _result(messages: MessageSet) -> dict[str, Any]:
    return {
        "accepted": not has_required(messages),
        "messages": [m.model_dump(mode="json") for m in sorted_messages(messages)],
    }


@app.get("/healthz", response_class=JSONResponse)
def healthz() -> dict[str, str]:
    return {"status": "ok", "version": __version__}


@app.get("/api/policy", response_class=JSONResponse)
def api_policy() -> Any:
    try:
        return _policy().to_dict()
    except VersionParseError as exc:
        return JSONResponse({"error": str(exc)}, status_code=500)


@app.post("/api/verify", response_class=JSONResponse)
async def api_verify(
    file: UploadFile = File(...),
    repo_name: str | None = Form(None),
) -> Any:
    """Verify an uploaded pom.xml.

    A pom.xml that cannot be parsed is a policy result (the invalid-pom
    message), not an HTTP error.
    """
    data = await file.read()
    messages: MessageSet = set()
    try:
        manifest = parse_manifest_bytes(data)
    except PomParseError as exc:
        logger.info("Rejected upload %s: %s", file.filename, exc)
        messages.add(VerificationMessage.required(INVALID_POM))
        return _result(messages)

    context = SubmissionContext(desired_repository_name=repo_name)
    MavenVerifier(policy=_policy()).verify(manifest, context, messages)
    return _result(messages)
