"""Setup configuration for FAERScope Core package."""

from setuptools import setup, find_packages

setup(
    name="faerscope-core",
    version="0.1.0",
    description="Pharmacovigilance disproportionality and trend statistics for FAERS report counts",
    author="",
    author_email="",
    packages=find_packages(where="src"),
    package_dir={"": "src"},
    python_requires=">=3.11",
    install_requires=[
        "pandas>=2.1.0",
        "numpy>=1.26.0",
        "openpyxl>=3.1.0",
        "python-dotenv>=1.0.0",
    ],
    extras_require={
        "dev": [
            "pytest>=8.0.0",
            "pytest-cov>=4.1.0",
            "black>=24.1.0",
            "ruff>=0.2.0",
        ],
    },
)
