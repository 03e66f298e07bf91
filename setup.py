from setuptools import find_namespace_packages, setup

# Physical structure under packages/ matches the import path
packages = find_namespace_packages(
    where="packages", include=["particlefx.core", "particlefx.core.*", "particlefx.cli"]
)

setup(
    name="particlefx",
    version="0.1.0",
    description="Animated property curves for a particle effect editor",
    packages=packages,
    package_dir={"": "packages"},
    python_requires=">=3.11",
    install_requires=[
        "numpy>=1.26",
        "pydantic>=2.5",
        "PyYAML>=6.0",
        "rich>=13.0",
    ],
    extras_require={
        "test": [
            "pytest>=8.0",
        ],
    },
    entry_points={
        "console_scripts": [
            "particlefx=particlefx.cli.main:main",
        ],
    },
)
