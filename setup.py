from setuptools import find_packages, setup

NAME = "invoice-totals"

setup(
    name=NAME,
    version="0.1.0",
    description="Invoice totals engine: subtotal, discount, tax and overdue rules.",
    python_requires=">=3.10",
    package_dir={"": "src"},
    packages=find_packages("src"),
    install_requires=["openpyxl>=3.1"],
    extras_require={"test": ["pytest>=7"]},
    entry_points={"console_scripts": ["invoicing=invoicing.cli:main"]},
)
