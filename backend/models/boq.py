import uuid

from sqlalchemy import Uuid

from config.constants import BOQStatus
from config.db import db


class BOQ(db.Model):
    __tablename__ = "boq"

    boq_id = db.Column(Uuid, primary_key=True, default=uuid.uuid4)
    # One BOQ per project; concurrent lazy creates are arbitrated here
    project_id = db.Column(Uuid, db.ForeignKey("project.project_id"), nullable=False, unique=True)
    status = db.Column(db.String(50), nullable=False, default=BOQStatus.DRAFT.value, index=True)
    selling_general_cost = db.Column(db.Float, nullable=True)
    created_at = db.Column(db.DateTime, default=db.func.now(), nullable=False)
    last_modified_at = db.Column(db.DateTime, default=db.func.now(), onupdate=db.func.now(), nullable=True)

    project = db.relationship("Project", backref=db.backref("boq", uselist=False, lazy=True))


class BOQJob(db.Model):
    __tablename__ = "boq_job"

    boq_job_id = db.Column(db.Integer, primary_key=True, autoincrement=True)
    boq_id = db.Column(Uuid, db.ForeignKey("boq.boq_id", ondelete="CASCADE"), nullable=False, index=True)
    job_id = db.Column(Uuid, db.ForeignKey("job.job_id"), nullable=False)
    quantity = db.Column(db.Float, nullable=False, default=0.0)
    labor_cost = db.Column(db.Float, nullable=False, default=0.0)

    __table_args__ = (
        db.UniqueConstraint('boq_id', 'job_id', name='uq_boq_job_boq_job'),
    )


# Snapshot of the material quantity a job needed when it was added to a BOQ
class MaterialPriceLog(db.Model):
    __tablename__ = "material_price_log"

    price_log_id = db.Column(db.Integer, primary_key=True, autoincrement=True)
    material_id = db.Column(Uuid, db.ForeignKey("material.material_id"), nullable=False)
    boq_id = db.Column(Uuid, db.ForeignKey("boq.boq_id", ondelete="CASCADE"), nullable=False, index=True)
    job_id = db.Column(Uuid, db.ForeignKey("job.job_id"), nullable=False)
    quantity = db.Column(db.Float, nullable=False, default=0.0)
    updated_at = db.Column(db.DateTime, default=db.func.now(), nullable=False)

    __table_args__ = (
        db.UniqueConstraint('material_id', 'boq_id', 'job_id', name='uq_material_price_log_material_boq_job'),
    )
