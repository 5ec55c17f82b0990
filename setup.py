from setuptools import setup, find_packages

setup(
    name="droplet-form",
    version="1.0.0",
    description="Interactive terminal form for creating DigitalOcean Droplets",
    packages=find_packages(where="src"),
    package_dir={"": "src"},
    install_requires=[
        "pydo>=0.2.0",
        "azure-core>=1.24.0",
        "prompt_toolkit>=3.0.29",
        "click>=8.0.0",
        "rich>=13.0.0",
    ],
    extras_require={
        "test": [
            "pytest>=7.0.0",
        ],
    },
    entry_points={
        "console_scripts": [
            "droplet-form=droplet_form.cli:main",
        ],
    },
    python_requires=">=3.9",
)
