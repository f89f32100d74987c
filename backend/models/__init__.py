from config.db import db
from models.project import Project
from models.job import Job, Material, JobMaterial
from models.boq import BOQ, BOQJob, MaterialPriceLog

__all__ = ['db', 'Project', 'Job', 'Material', 'JobMaterial', 'BOQ', 'BOQJob', 'MaterialPriceLog']
