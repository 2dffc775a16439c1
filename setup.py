from setuptools import setup, find_packages

setup(
    name="sendgrid-emailer",
    version="0.1.0",
    description="SendGrid email adapter with config validation and a provider-agnostic message model",
    author="",
    author_email="",
    packages=find_packages(where="src"),
    package_dir={"": "src"},
    python_requires=">=3.8",
    install_requires=[
        "sendgrid>=6.9.0",
        "email-validator>=2.0.0",
        "python-dotenv>=0.19.0",
        "pydantic>=2.0.0",
        "pydantic-settings>=2.0.0",
        "PyYAML>=5.4.0",
    ],
    extras_require={
        "test": [
            "pytest>=7.0.0",
        ],
    },
)
