"""
Job Pool API.

Core components:
- db: SQLAlchemy tables for jobs, companies, applicants and locations
- services: job listing, detail, posting and applications
- uploads: CV/logo/image upload gate
- api: FastAPI app, auth gate and routes
"""
