import uuid

from sqlalchemy import Uuid

from config.db import db


class Project(db.Model):
    __tablename__ = 'project'

    project_id = db.Column(Uuid, primary_key=True, default=uuid.uuid4)
    project_name = db.Column(db.String(255), nullable=False)
    created_at = db.Column(db.DateTime, default=db.func.now(), nullable=False)
