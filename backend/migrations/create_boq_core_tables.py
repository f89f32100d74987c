"""
Migration: Create the BOQ core tables
project, boq, job, material, job_material, boq_job, material_price_log

The unique constraints on boq.project_id, boq_job(boq_id, job_id) and
material_price_log(material_id, boq_id, job_id) are what the BOQ service
relies on to reject concurrent duplicate inserts.
"""
import os
from dotenv import load_dotenv
import psycopg2

load_dotenv()

# Database connection from DATABASE_URL
DATABASE_URL = os.getenv("DATABASE_URL", "").replace("postgresql+psycopg2://", "postgresql://")

CREATE_TABLES_SQL = """
    CREATE TABLE IF NOT EXISTS project (
        project_id UUID PRIMARY KEY,
        project_name VARCHAR(255) NOT NULL,
        created_at TIMESTAMP NOT NULL DEFAULT CURRENT_TIMESTAMP
    );

    CREATE TABLE IF NOT EXISTS boq (
        boq_id UUID PRIMARY KEY,
        project_id UUID NOT NULL REFERENCES project(project_id),
        status VARCHAR(50) NOT NULL DEFAULT 'draft',
        selling_general_cost DOUBLE PRECISION NULL,
        created_at TIMESTAMP NOT NULL DEFAULT CURRENT_TIMESTAMP,
        last_modified_at TIMESTAMP NULL DEFAULT CURRENT_TIMESTAMP,
        CONSTRAINT boq_project_id_key UNIQUE (project_id)
    );

    CREATE TABLE IF NOT EXISTS job (
        job_id UUID PRIMARY KEY,
        name VARCHAR(255) NOT NULL,
        description TEXT NULL,
        unit VARCHAR(50) NOT NULL
    );

    CREATE TABLE IF NOT EXISTS material (
        material_id UUID PRIMARY KEY,
        name VARCHAR(255) NOT NULL,
        unit VARCHAR(50) NOT NULL,
        CONSTRAINT material_name_key UNIQUE (name)
    );

    CREATE TABLE IF NOT EXISTS job_material (
        job_material_id SERIAL PRIMARY KEY,
        job_id UUID NOT NULL REFERENCES job(job_id) ON DELETE CASCADE,
        material_id UUID NOT NULL REFERENCES material(material_id),
        quantity DOUBLE PRECISION NOT NULL DEFAULT 0,
        CONSTRAINT uq_job_material_job_material UNIQUE (job_id, material_id)
    );

    CREATE TABLE IF NOT EXISTS boq_job (
        boq_job_id SERIAL PRIMARY KEY,
        boq_id UUID NOT NULL REFERENCES boq(boq_id) ON DELETE CASCADE,
        job_id UUID NOT NULL REFERENCES job(job_id),
        quantity DOUBLE PRECISION NOT NULL DEFAULT 0,
        labor_cost DOUBLE PRECISION NOT NULL DEFAULT 0,
        CONSTRAINT uq_boq_job_boq_job UNIQUE (boq_id, job_id)
    );

    CREATE TABLE IF NOT EXISTS material_price_log (
        price_log_id SERIAL PRIMARY KEY,
        material_id UUID NOT NULL REFERENCES material(material_id),
        boq_id UUID NOT NULL REFERENCES boq(boq_id) ON DELETE CASCADE,
        job_id UUID NOT NULL REFERENCES job(job_id),
        quantity DOUBLE PRECISION NOT NULL DEFAULT 0,
        updated_at TIMESTAMP NOT NULL DEFAULT CURRENT_TIMESTAMP,
        CONSTRAINT uq_material_price_log_material_boq_job UNIQUE (material_id, boq_id, job_id)
    );
"""

CREATE_INDEXES_SQL = """
    CREATE INDEX IF NOT EXISTS ix_boq_status ON boq(status);
    CREATE INDEX IF NOT EXISTS ix_job_name ON job(name);
    CREATE INDEX IF NOT EXISTS ix_job_material_job_id ON job_material(job_id);
    CREATE INDEX IF NOT EXISTS ix_boq_job_boq_id ON boq_job(boq_id);
    CREATE INDEX IF NOT EXISTS ix_material_price_log_boq_id ON material_price_log(boq_id);
"""


def run_migration():
    """Create the BOQ core tables and indexes"""
    conn = None
    cursor = None

    try:
        conn = psycopg2.connect(DATABASE_URL)
        cursor = conn.cursor()

        print("Creating BOQ core tables...")
        cursor.execute(CREATE_TABLES_SQL)
        print("[OK] Tables created")

        cursor.execute(CREATE_INDEXES_SQL)
        print("[OK] Indexes created")

        conn.commit()
        print("\n[SUCCESS] Migration completed successfully!")

    except Exception as e:
        if conn:
            conn.rollback()
        print(f"\n[ERROR] Migration failed: {str(e)}")
        raise

    finally:
        if cursor:
            cursor.close()
        if conn:
            conn.close()


if __name__ == "__main__":
    if not DATABASE_URL:
        raise SystemExit("DATABASE_URL is not set")
    run_migration()
