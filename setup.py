from setuptools import setup, find_packages

setup(
    name="FoxesRabbits",
    version="0.1",
    packages=find_packages("src"),
    package_dir={"": "src"},
    python_requires=">=3.10",
    description="Fox/rabbit gridworld ecosystem with a deterministic, seed-threaded stepping engine, pygame viewer and energy charts.",
    author="FoxesRabbits developers",
    install_requires=[
        "numpy",
        "pygame",
        "matplotlib",
    ],
    extras_require={
        "test": ["pytest"],
    },
    entry_points={
        "console_scripts": [
            "foxesrabbits=foxesrabbits.__main__:main",
        ],
    },
)
