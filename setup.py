from setuptools import find_packages, setup

setup(
    name="inventory",
    version="0.1.0",
    description="Product and barcode inventory manager",
    packages=find_packages(include=["inventory", "inventory.*"]),
    python_requires=">=3.10",
    install_requires=[
        "click",
        "pandas",
        "python-dotenv",
        "sqlalchemy>=1.4"
    ],
    extras_require={
        "dev": ["pytest"],
        "mysql": ["pymysql"],
        "postgres": ["psycopg2-binary"]
    },
    entry_points={
        "console_scripts": [
            "inventory=inventory.cli.main:cli"
        ]
    },
)
