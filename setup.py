from setuptools import find_packages, setup

setup(
    name="bedrock-workspace",
    version="1.0.0",
    description="Create, update, clean and inspect a Minecraft Bedrock development workspace.",
    python_requires=">=3.12",
    packages=find_packages(include=["bedrock_workspace", "bedrock_workspace.*"]),
    install_requires=[
        "result>=0.17",
        "rich>=13.7",
        "typer>=0.12",
    ],
    extras_require={
        "test": ["pytest>=8.0"],
    },
    entry_points={
        "console_scripts": [
            "bedrock-workspace=bedrock_workspace.cli:main",
        ],
    },
)
