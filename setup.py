from setuptools import setup, find_packages

setup(
    name="s3-routes",
    version="0.1.0",
    packages=find_packages(include=["s3routes", "s3routes.*"]),
    package_data={
        "s3routes.routes.utils": ["s3_errors.json"],
    },
    install_requires=[
        "flask>=2.2.0",
        "flask-cors>=3.0.10",
        "xmltodict>=0.13.0",
        "python-dotenv>=0.21.0",
    ],
    extras_require={
        "test": [
            "pytest>=7.0.0",
        ],
    },
    python_requires=">=3.8",
)
