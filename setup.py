from __future__ import annotations

from setuptools import find_packages, setup  # type: ignore


setup(
    name="fhirconf",
    version="0.1.0",
    description="Conformance statement and OperationDefinition endpoints for FHIR REST servers",
    python_requires=">=3.10",
    package_dir={"": "src"},
    packages=find_packages(where="src"),
    install_requires=[
        "fastapi",
        "uvicorn",
        "httpx",
    ],
    extras_require={
        "test": [
            "pytest",
            "httpx",
        ],
    },
    entry_points={
        "console_scripts": [
            "fhirconf=fhirconf.__main__:main",
        ],
    },
)
