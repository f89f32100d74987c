"""
BOQ Service
Aggregates the project BOQ view and applies status-gated job mutations.

Each public method runs inside its own transaction on the injected session:
the success path commits explicitly, every other exit rolls back.
"""
import uuid
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Dict, List, Optional

from sqlalchemy import delete, select, update

from config.constants import BOQ_STATUS_TRANSITIONS, BOQStatus, DEFAULT_SELLING_GENERAL_COST
from config.db import apply_statement_timeout, store_step, transaction_scope
from config.logging import get_logger
from models.boq import BOQ, BOQJob, MaterialPriceLog
from models.job import Job, JobMaterial
from models.project import Project
from utils.deadline import Deadline
from utils.errors import ConstraintError, DataAccessError, InvalidStateError, NotFoundError
from utils.validators import BOQJobRequest

log = get_logger()


@dataclass
class JobView:
    job_id: uuid.UUID
    name: str
    description: str
    unit: str

    def to_dict(self) -> Dict:
        return {
            'job_id': str(self.job_id),
            'name': self.name,
            'description': self.description,
            'unit': self.unit,
        }


@dataclass
class BOQView:
    id: uuid.UUID
    project_id: uuid.UUID
    # stored value, unparsed; only the mutation gates reject unknown statuses
    status: str
    selling_general_cost: float
    jobs: List[JobView] = field(default_factory=list)

    def to_dict(self) -> Dict:
        return {
            'id': str(self.id),
            'project_id': str(self.project_id),
            'status': self.status,
            'selling_general_cost': self.selling_general_cost,
            'jobs': [job.to_dict() for job in self.jobs],
        }


def parse_status(value) -> BOQStatus:
    """Convert a stored status into BOQStatus, rejecting unknown values"""
    try:
        return BOQStatus.parse(value)
    except ValueError as e:
        raise InvalidStateError(str(e), status=value) from e


def require_draft(value, action: str) -> BOQStatus:
    """
    Status gate for job mutations

    Args:
        value: Stored status value
        action: What the caller is trying to do, used in the error message

    Returns:
        BOQStatus.DRAFT

    Raises:
        InvalidStateError: For any status other than draft
    """
    status = parse_status(value)
    if status is BOQStatus.DRAFT:
        return status
    if status in (BOQStatus.CONFIRMED, BOQStatus.APPROVED, BOQStatus.REJECTED):
        raise InvalidStateError(f"can only {action} BOQ in draft status", status=status.value)
    raise InvalidStateError(f"unhandled BOQ status: {status.value}", status=status.value)


class BOQService:
    """BOQ aggregation and mutation on top of one SQLAlchemy session"""

    def __init__(self, session):
        self.session = session

    # ---------- Aggregator ----------

    def get_boq_with_project(self, project_id: uuid.UUID, deadline: Optional[Deadline] = None) -> BOQView:
        """
        Build the BOQ view for a project, creating a draft BOQ on first access

        A unique-constraint violation on create means another request created
        the BOQ first; the read is retried once in a new transaction.
        """
        deadline = deadline or Deadline()
        try:
            return self._load_boq_view(project_id, deadline)
        except ConstraintError:
            log.info(f"BOQ for project {project_id} created concurrently, re-reading")
            return self._load_boq_view(project_id, deadline)

    def _load_boq_view(self, project_id, deadline) -> BOQView:
        operation = f"get BOQ for project {project_id}"
        with transaction_scope(self.session) as session:
            apply_statement_timeout(session, deadline)
            deadline.check(operation)

            with store_step("check BOQ existence"):
                boq = session.execute(
                    select(BOQ).where(BOQ.project_id == project_id)
                ).scalar_one_or_none()

            if boq is None:
                boq = self._create_draft_boq(session, project_id)

            deadline.check(operation)
            with store_step("get jobs"):
                jobs = session.execute(
                    select(Job)
                    .join(BOQJob, BOQJob.job_id == Job.job_id)
                    .where(BOQJob.boq_id == boq.boq_id)
                    .distinct()
                ).scalars().all()

            view = BOQView(
                id=boq.boq_id,
                project_id=boq.project_id,
                status=boq.status,
                selling_general_cost=(
                    float(boq.selling_general_cost)
                    if boq.selling_general_cost is not None
                    else DEFAULT_SELLING_GENERAL_COST
                ),
                jobs=[
                    JobView(job_id=job.job_id, name=job.name, description=job.description or "", unit=job.unit)
                    for job in jobs
                ],
            )

            deadline.check(operation)
            with store_step("commit transaction"):
                session.commit()

        return view

    def _create_draft_boq(self, session, project_id) -> BOQ:
        with store_step("check project existence"):
            project = session.get(Project, project_id)
        if project is None:
            raise DataAccessError("failed to create BOQ: project not found", project_id=str(project_id))

        boq = BOQ(project_id=project_id, status=BOQStatus.DRAFT.value, selling_general_cost=None)
        session.add(boq)
        with store_step("create BOQ", on_integrity_error=ConstraintError):
            session.flush()

        log.info(f"Created draft BOQ {boq.boq_id} for project {project_id}")
        return boq

    # ---------- Mutator ----------

    def add_boq_job(self, boq_id: uuid.UUID, job_request: BOQJobRequest, deadline: Optional[Deadline] = None) -> None:
        """
        Add a job to a draft BOQ and snapshot its material quantities

        Price-log rows are only inserted for (boq, material, job) triples that
        do not have one yet.
        """
        deadline = deadline or Deadline()
        operation = f"add job {job_request.job_id} to BOQ {boq_id}"
        with transaction_scope(self.session) as session:
            apply_statement_timeout(session, deadline)
            deadline.check(operation)

            status = self._lock_boq_status(session, boq_id)
            require_draft(status, "add jobs to")

            deadline.check(operation)
            session.add(BOQJob(
                boq_id=boq_id,
                job_id=job_request.job_id,
                quantity=job_request.quantity,
                labor_cost=job_request.labor_cost,
            ))
            with store_step("add job to BOQ", on_integrity_error=ConstraintError):
                session.flush()

            deadline.check(operation)
            with store_step("get job materials"):
                materials = session.execute(
                    select(JobMaterial.material_id, JobMaterial.quantity)
                    .where(JobMaterial.job_id == job_request.job_id)
                ).all()

            created = self._log_material_quantities(session, boq_id, job_request.job_id, materials, deadline)

            deadline.check(operation)
            with store_step("commit transaction"):
                session.commit()

        log.info(f"Added job {job_request.job_id} to BOQ {boq_id} ({created} price log entries created)")

    def _log_material_quantities(self, session, boq_id, job_id, materials, deadline) -> int:
        with store_step("check material price log existence"):
            logged = set(session.execute(
                select(MaterialPriceLog.material_id).where(
                    MaterialPriceLog.boq_id == boq_id,
                    MaterialPriceLog.job_id == job_id,
                )
            ).scalars().all())

        created = 0
        for material_id, quantity in materials:
            if material_id in logged:
                continue
            session.add(MaterialPriceLog(
                material_id=material_id,
                boq_id=boq_id,
                job_id=job_id,
                quantity=quantity,
                updated_at=datetime.now(timezone.utc),
            ))
            logged.add(material_id)
            created += 1

        if created:
            deadline.check(f"log material quantities for job {job_id}")
            with store_step("create material price log", on_integrity_error=ConstraintError):
                session.flush()
            log.debug(f"Logged {created} material quantities for job {job_id} in BOQ {boq_id}")
        return created

    def delete_boq_job(self, boq_id: uuid.UUID, job_id: uuid.UUID, deadline: Optional[Deadline] = None) -> None:
        """
        Remove a job from a draft BOQ

        Deleting a job that is not in the BOQ is a no-op. Price-log rows are
        kept as historical snapshots.
        """
        deadline = deadline or Deadline()
        operation = f"delete job {job_id} from BOQ {boq_id}"
        with transaction_scope(self.session) as session:
            apply_statement_timeout(session, deadline)
            deadline.check(operation)

            status = self._lock_boq_status(session, boq_id)
            require_draft(status, "delete jobs from")

            deadline.check(operation)
            with store_step("delete job from BOQ"):
                result = session.execute(
                    delete(BOQJob).where(BOQJob.boq_id == boq_id, BOQJob.job_id == job_id)
                )

            deadline.check(operation)
            with store_step("commit transaction"):
                session.commit()

        if result.rowcount:
            log.info(f"Deleted job {job_id} from BOQ {boq_id}")
        else:
            log.info(f"Job {job_id} not in BOQ {boq_id}, nothing deleted")

    def update_boq_status(self, boq_id: uuid.UUID, new_status, deadline: Optional[Deadline] = None) -> BOQStatus:
        """Move a draft BOQ to a terminal status"""
        deadline = deadline or Deadline()
        target = parse_status(new_status)
        operation = f"update status of BOQ {boq_id}"
        with transaction_scope(self.session) as session:
            apply_statement_timeout(session, deadline)
            deadline.check(operation)

            current = parse_status(self._lock_boq_status(session, boq_id))
            if target not in BOQ_STATUS_TRANSITIONS[current]:
                raise InvalidStateError(
                    f"cannot change BOQ status from {current.value} to {target.value}",
                    current=current.value,
                    requested=target.value,
                )

            with store_step("update BOQ status"):
                session.execute(
                    update(BOQ)
                    .where(BOQ.boq_id == boq_id)
                    .values(status=target.value, last_modified_at=datetime.now(timezone.utc))
                )

            deadline.check(operation)
            with store_step("commit transaction"):
                session.commit()

        log.info(f"BOQ {boq_id} status changed from {current.value} to {target.value}")
        return target

    def update_selling_general_cost(self, boq_id: uuid.UUID, cost: float, deadline: Optional[Deadline] = None) -> None:
        """Set the selling general cost of a draft BOQ"""
        deadline = deadline or Deadline()
        operation = f"update selling general cost of BOQ {boq_id}"
        with transaction_scope(self.session) as session:
            apply_statement_timeout(session, deadline)
            deadline.check(operation)

            status = self._lock_boq_status(session, boq_id)
            require_draft(status, "update the selling general cost of")

            with store_step("update selling general cost"):
                session.execute(
                    update(BOQ)
                    .where(BOQ.boq_id == boq_id)
                    .values(selling_general_cost=cost, last_modified_at=datetime.now(timezone.utc))
                )

            deadline.check(operation)
            with store_step("commit transaction"):
                session.commit()

        log.info(f"BOQ {boq_id} selling general cost set to {cost}")

    def _lock_boq_status(self, session, boq_id) -> str:
        """Read the BOQ status with a row lock held until the transaction ends"""
        with store_step("get BOQ status"):
            status = session.execute(
                select(BOQ.status).where(BOQ.boq_id == boq_id).with_for_update()
            ).scalar_one_or_none()
        if status is None:
            raise NotFoundError("boq not found", boq_id=str(boq_id))
        return status
