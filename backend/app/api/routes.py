"""HTTP routes for the Flask API."""

import sqlite3
from http import HTTPStatus
from typing import Any, Dict

from flask import Blueprint, current_app, jsonify, request
from loguru import logger
from pydantic import ValidationError

from backend.core.retirement import (
    InvalidInput,
    calculate_retirement_impact,
    parse_retirement_inputs,
)
from backend.domain.store import ContributionStore
from backend.models import ContributionSettings, ContributionType, default_contribution_value
from backend.schemas.contributions import YtdContributionsResponse
from backend.schemas.retirement import RetirementImpactResponse
from backend.schemas.settings import (
    ContributionDefaultsResponse,
    SettingsSavedResponse,
    UserSettingsResponse,
)

api_bp = Blueprint("api", __name__)


def _store() -> ContributionStore:
    return current_app.extensions["contribution_store"]


@api_bp.errorhandler(ValidationError)
def _handle_validation_error(exc: ValidationError):
    """Convert Pydantic validation errors into JSON responses."""
    logger.warning(f"Rejected settings payload: {exc.error_count()} error(s)")
    detail = exc.errors(include_url=False, include_context=False)
    return jsonify({"error": "Invalid settings", "detail": detail}), HTTPStatus.BAD_REQUEST


@api_bp.errorhandler(InvalidInput)
def _handle_invalid_input(exc: InvalidInput):
    logger.warning(f"Rejected retirement-impact request: {exc}")
    body: Dict[str, Any] = {"error": str(exc), "detail": exc.errors}
    if exc.missing:
        body["missing"] = exc.missing
    return jsonify(body), HTTPStatus.BAD_REQUEST


@api_bp.errorhandler(sqlite3.Error)
def _handle_storage_error(exc: sqlite3.Error):
    logger.exception("Storage failure")
    return jsonify({"error": str(exc)}), HTTPStatus.INTERNAL_SERVER_ERROR


@api_bp.get("/user-settings")
def get_user_settings() -> Any:
    """Latest saved settings, or the defaults when nothing was saved yet."""
    latest = _store().latest_settings()
    if latest is None:
        response = UserSettingsResponse()
    else:
        settings_id, settings = latest
        response = UserSettingsResponse(id=settings_id, **settings.model_dump())
    return jsonify(response.model_dump(mode="json", exclude_none=True))


@api_bp.post("/user-settings")
def update_user_settings() -> Any:
    raw_payload = request.get_json(force=True, silent=True)
    if not isinstance(raw_payload, dict):
        raw_payload = {}
    if not raw_payload.get("contribution_type") or raw_payload.get("contribution_value") is None:
        return (
            jsonify({"error": "Contribution type and value are required"}),
            HTTPStatus.BAD_REQUEST,
        )

    # a new snapshot replaces the old one; omitted fields take the defaults
    settings = ContributionSettings.model_validate(
        {key: value for key, value in raw_payload.items() if value is not None}
    )
    settings_id = _store().save_settings(settings)
    logger.info(
        f"Saved settings #{settings_id}: {settings.contribution_type} {settings.contribution_value}"
    )
    response = SettingsSavedResponse(id=settings_id, **settings.model_dump())
    return jsonify(response.model_dump(mode="json"))


@api_bp.get("/contribution-defaults")
def contribution_defaults() -> Any:
    """Starting values the UI offers when the contribution mode is switched."""
    response = ContributionDefaultsResponse(
        percentage=default_contribution_value(ContributionType.PERCENTAGE),
        fixed=default_contribution_value(ContributionType.FIXED),
    )
    return jsonify(response.model_dump())


@api_bp.get("/ytd-contributions")
def ytd_contributions() -> Any:
    entries = _store().list_contributions()
    response = YtdContributionsResponse(
        contributions=entries,
        totalYTD=sum(entry.amount for entry in entries),
    )
    return jsonify(response.model_dump(mode="json"))


@api_bp.get("/retirement-impact")
def retirement_impact() -> Any:
    """Project the balance at retirement for the given contribution setting."""
    inputs = parse_retirement_inputs(request.args.to_dict())
    settings = current_app.config["SETTINGS"]
    result = calculate_retirement_impact(inputs, annual_return_rate=settings.annual_return_rate)
    response = RetirementImpactResponse.from_projection(result)
    return jsonify(response.model_dump())
