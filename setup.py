from setuptools import setup, find_packages

setup(
    name="taskboard",
    version="0.1.0",
    description="Task list components synchronized with a JSON REST task store",
    author="mseibert",
    package_dir={"": "src"},
    packages=find_packages(where="src"),
    package_data={"taskboard.ui": ["templates.yaml"]},
    python_requires=">=3.10",
    install_requires=[
        "aiohttp>=3.9",
        "Pillow>=10.0.0",
        "PyYAML>=6.0",
        "python-dotenv>=1.0.0",
    ],
    extras_require={
        "test": [
            "pytest>=7.0",
            "pytest-asyncio>=0.23",
        ],
    },
    entry_points={
        "console_scripts": [
            "taskboard=taskboard.main:main",
        ],
    },
)
