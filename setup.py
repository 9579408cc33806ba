from setuptools import setup, find_namespace_packages

setup(
    name="savings_circle",
    version="0.1.0",
    description="Savings group creation: form validation, request building and ledger submission",
    packages=find_namespace_packages(include=["circle_core", "circle_core.*", "backend", "backend.*"]),
    install_requires=[
        "pydantic>=2.0",
        "pydantic-settings>=2.0",
        "fastapi>=0.100",
        "sqlmodel>=0.0.14,<0.0.45",
        "SQLAlchemy>=2.0",
        "tenacity>=8.0",
        "httpx>=0.24",
    ],
    extras_require={
        "test": [
            "pytest>=7.0",
            "pytest-asyncio>=0.21",
        ],
    },
    python_requires=">=3.9",
)
