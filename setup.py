# Copyright (c) 2025 adcl.io
# All Rights Reserved.
#
# This software is proprietary and confidential. Unauthorized copying,
# distribution, or use of this software is strictly prohibited.

"""
Setup configuration for the BrowserAct task adapter
"""

from setuptools import setup, find_packages

setup(
    name="browseract-task-adapter",
    version="1.0.0",
    description="Run BrowserAct agents and workflows from a workflow-automation host",
    author="adcl.io",
    packages=find_packages(include=["browseract_adapter", "browseract_adapter.*"]),
    python_requires=">=3.9",
    install_requires=[
        "httpx>=0.24.0",
        "pydantic>=2.0.0",
        "PyYAML>=6.0",
        "python-dotenv>=1.0.0",
    ],
    extras_require={
        "dev": [
            "pytest>=7.0.0",
            "pytest-asyncio>=0.21.0",
        ]
    },
)
