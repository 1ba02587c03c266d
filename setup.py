from setuptools import setup, find_packages

setup(
    name="meditracker",
    version="0.1.0",
    packages=find_packages(exclude=["tests", "tests.*"]),
    install_requires=[
        "fastapi",
        "uvicorn",
        "sqlalchemy>=2.0,<2.1",
        "psycopg2-binary",
        "python-jose[cryptography]",
        "passlib[bcrypt]",
        "bcrypt<4.1",
        "python-multipart",
        "python-dotenv",
        "pydantic[email]>=2",
        "pydantic-settings",
        "celery",
        "prometheus-client",
        "prometheus-fastapi-instrumentator",
        "google-api-python-client",
        "google-auth",
        "httplib2",
        "requests",
    ],
    extras_require={
        "test": [
            "pytest",
            "httpx",
        ],
    },
)
