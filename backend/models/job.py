import uuid

from sqlalchemy import Uuid

from config.db import db


# Master tables - reusable across BOQs
class Job(db.Model):
    __tablename__ = "job"

    job_id = db.Column(Uuid, primary_key=True, default=uuid.uuid4)
    name = db.Column(db.String(255), nullable=False, index=True)
    description = db.Column(db.Text, nullable=True)
    unit = db.Column(db.String(50), nullable=False)


class Material(db.Model):
    __tablename__ = "material"

    material_id = db.Column(Uuid, primary_key=True, default=uuid.uuid4)
    name = db.Column(db.String(255), nullable=False, unique=True, index=True)
    unit = db.Column(db.String(50), nullable=False)


# Material composition of a job (read-only for BOQ operations)
class JobMaterial(db.Model):
    __tablename__ = "job_material"

    job_material_id = db.Column(db.Integer, primary_key=True, autoincrement=True)
    job_id = db.Column(Uuid, db.ForeignKey("job.job_id", ondelete="CASCADE"), nullable=False, index=True)
    material_id = db.Column(Uuid, db.ForeignKey("material.material_id"), nullable=False)
    quantity = db.Column(db.Float, nullable=False, default=0.0)

    job = db.relationship("Job", backref=db.backref("materials", lazy=True))
    material = db.relationship("Material")

    __table_args__ = (
        db.UniqueConstraint('job_id', 'material_id', name='uq_job_material_job_material'),
    )
