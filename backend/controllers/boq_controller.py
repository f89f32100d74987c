"""
BOQ Controller
Translates HTTP requests into BOQService calls and maps errors to status codes
"""
from flask import current_app, g, jsonify, request

from config.db import db
from config.logging import get_logger
from services.boq_service import BOQService
from utils.deadline import Deadline
from utils.errors import BOQServiceError, DataAccessError
from utils.validators import (
    ValidationError,
    validate_boq_job_request,
    validate_selling_general_cost,
    validate_status_update,
)

log = get_logger()


def _service():
    return BOQService(db.session)


def _request_deadline():
    return Deadline(timeout=current_app.config.get('REQUEST_TIMEOUT_SECONDS'))


def _error_response(error):
    """Build the JSON error response for a validation or BOQ error"""
    if isinstance(error, ValidationError):
        body = {'success': False, 'error': error.message}
        if error.details:
            body['details'] = error.details
        return jsonify(body), 400

    if isinstance(error, DataAccessError):
        log.error(f"BOQ data access error: {error.message}")
    else:
        log.warning(f"BOQ request rejected ({type(error).__name__}): {error.message}")
    return jsonify({'success': False, 'error': error.message}), error.http_status


def get_project_boq(project_id):
    """Get the BOQ of a project (created as draft on first access)"""
    try:
        boq_view = _service().get_boq_with_project(project_id, deadline=_request_deadline())
        return jsonify({
            'success': True,
            'data': boq_view.to_dict()
        }), 200
    except BOQServiceError as e:
        return _error_response(e)


def add_boq_job(boq_id):
    """Add a job to a draft BOQ"""
    try:
        job_request = validate_boq_job_request(request.get_json(silent=True))
        _service().add_boq_job(boq_id, job_request, deadline=_request_deadline())
        log.info(f"User {g.get('user_id')} added job {job_request.job_id} to BOQ {boq_id}")
        return jsonify({
            'success': True,
            'message': 'Job added to BOQ successfully'
        }), 201
    except (ValidationError, BOQServiceError) as e:
        return _error_response(e)


def delete_boq_job(boq_id, job_id):
    """Remove a job from a draft BOQ"""
    try:
        _service().delete_boq_job(boq_id, job_id, deadline=_request_deadline())
        log.info(f"User {g.get('user_id')} removed job {job_id} from BOQ {boq_id}")
        return jsonify({
            'success': True,
            'message': 'Job removed from BOQ successfully'
        }), 200
    except BOQServiceError as e:
        return _error_response(e)


def update_boq_status(boq_id):
    """Approve or reject a draft BOQ"""
    try:
        new_status = validate_status_update(request.get_json(silent=True))
        status = _service().update_boq_status(boq_id, new_status, deadline=_request_deadline())
        return jsonify({
            'success': True,
            'message': 'BOQ status updated successfully',
            'status': status.value
        }), 200
    except (ValidationError, BOQServiceError) as e:
        return _error_response(e)


def update_selling_general_cost(boq_id):
    """Set the selling general cost of a draft BOQ"""
    try:
        cost = validate_selling_general_cost(request.get_json(silent=True))
        _service().update_selling_general_cost(boq_id, cost, deadline=_request_deadline())
        return jsonify({
            'success': True,
            'message': 'Selling general cost updated successfully',
            'selling_general_cost': cost
        }), 200
    except (ValidationError, BOQServiceError) as e:
        return _error_response(e)
