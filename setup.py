from setuptools import setup, find_packages

setup(
    name="psysim",
    version="0.1.0",
    packages=find_packages(exclude=["tests", "tests.*"]),
    py_modules=["run_simulation"],
    python_requires=">=3.8",
    install_requires=[
        "numpy",
        "pandas",
        "scipy",
    ],
    extras_require={
        "test": ["pytest"],
    },
    entry_points={
        "console_scripts": [
            "psysim-run=run_simulation:main",
        ],
    },
    license="MIT",
)
