# setup.py
from setuptools import setup, find_packages

setup(
    name="sales-dashboard",
    version="0.1.0",
    description="Search, filter and chart a remote catalog of product transactions",
    packages=find_packages(exclude=["tests", "tests.*"]),
    package_data={"webapp": ["templates/*.html"]},
    python_requires=">=3.10",
    install_requires=[
        "click>=7.0",
        "pyyaml>=5.3",
        "pandas>=1.1",
        "xlsxwriter>=3.0",
        "python-dotenv>=0.19",
        "fastapi>=0.108",
        "jinja2>=3.0",
    ],
    extras_require={
        "test": [
            "pytest>=7.0",
            "httpx>=0.24",
            "openpyxl>=3.0",
        ],
    },
    entry_points={
        "console_scripts": [
            "sales-dashboard=sales_dashboard.cli:main",
        ],
    },
    classifiers=[
        "Programming Language :: Python :: 3",
        "Operating System :: OS Independent",
    ],
)
