"""
BOQ Routes - API endpoints for Bill of Quantities management
"""
from flask import Blueprint

from controllers.boq_controller import (
    add_boq_job,
    delete_boq_job,
    get_project_boq,
    update_boq_status,
    update_selling_general_cost,
)
from utils.authentication import jwt_required

boq_routes = Blueprint('boq_routes', __name__, url_prefix='/api')


# BOQ view
@boq_routes.route('/project/<uuid:project_id>/boq', methods=['GET'])
@jwt_required
def get_project_boq_route(project_id):
    """View the BOQ of a project"""
    return get_project_boq(project_id)


# BOQ jobs
@boq_routes.route('/boq/<uuid:boq_id>/jobs', methods=['POST'])
@jwt_required
def add_boq_job_route(boq_id):
    """Add a job to a draft BOQ"""
    return add_boq_job(boq_id)


@boq_routes.route('/boq/<uuid:boq_id>/jobs/<uuid:job_id>', methods=['DELETE'])
@jwt_required
def delete_boq_job_route(boq_id, job_id):
    """Remove a job from a draft BOQ"""
    return delete_boq_job(boq_id, job_id)


# BOQ lifecycle
@boq_routes.route('/boq/<uuid:boq_id>/status', methods=['PUT'])
@jwt_required
def update_boq_status_route(boq_id):
    return update_boq_status(boq_id)


@boq_routes.route('/boq/<uuid:boq_id>/selling_general_cost', methods=['PUT'])
@jwt_required
def update_selling_general_cost_route(boq_id):
    return update_selling_general_cost(boq_id)
