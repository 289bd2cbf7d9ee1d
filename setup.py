"""
Setup script for fhir-json-validator package.

This setup script is used for local development and testing.
"""

from setuptools import setup, find_packages

setup(
    name="fhir-json-validator",
    version="1.0.0",
    description="Validator adapter for FHIR JSON resources with pass/fail test assertion reports",
    packages=find_packages(where="src"),
    package_dir={"": "src"},
    package_data={"fhir_json_validator": ["messages/*.yaml"]},
    include_package_data=True,
    python_requires=">=3.10",
    install_requires=[
        "pyyaml",
        "pydantic>=2.5.0,<3",
        "pydantic-settings>=2.2.0",
        "fhir.resources>=8.0.0",
    ],
    extras_require={
        "dev": [
            "pytest>=7.0.0",
            "pytest-cov>=4.0.0",
            "black",
            "isort",
            "pylint",
        ],
    },
    entry_points={
        "console_scripts": [
            "fhir-json-validate=fhir_json_validator.cli.validate:main",
        ],
    },
    classifiers=[
        "Programming Language :: Python :: 3",
        "License :: OSI Approved :: Apache Software License",
        "Operating System :: OS Independent",
    ],
)
