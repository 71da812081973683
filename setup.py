"""
Setup configuration for Chromaflow
"""
from setuptools import setup, find_namespace_packages
from pathlib import Path

# Read README
readme_file = Path(__file__).parent / "README.md"
long_description = readme_file.read_text(encoding="utf-8") if readme_file.exists() else ""

setup(
    name="chromaflow",
    version="1.0.0",
    description="SVG Animated Gradients - CSS/SVG gradient designer with AI mood generation",
    long_description=long_description,
    long_description_content_type="text/markdown",
    author="Chromaflow Team",
    license="MIT",
    packages=find_namespace_packages(include=["core", "services"]),
    py_modules=["app", "server"],
    python_requires=">=3.10",
    install_requires=[
        "mcp>=1.0.0,<2",
        "pydantic>=2.0.0",
        "pydantic-settings>=2.0.0",
        "python-dotenv>=1.0.0",
        "langchain-core>=0.1.0",
        "langchain-openai>=0.1.0",
        "langchain-google-genai>=1.0.0",
        "gradio>=4.0.0",
    ],
    extras_require={
        "dev": [
            "pytest>=7.0",
            "pytest-asyncio>=0.21.0",
            "black>=23.0",
            "flake8>=6.0",
            "mypy>=1.0",
        ],
    },
    entry_points={
        "console_scripts": [
            "chromaflow-mcp=server:mcp.run",
        ],
    },
    classifiers=[
        "Development Status :: 4 - Beta",
        "Environment :: Web Environment",
        "Intended Audience :: Developers",
        "License :: OSI Approved :: MIT License",
        "Natural Language :: English",
        "Operating System :: OS Independent",
        "Programming Language :: Python",
        "Programming Language :: Python :: 3",
        "Programming Language :: Python :: 3.10",
        "Programming Language :: Python :: 3.11",
        "Programming Language :: Python :: 3.12",
        "Topic :: Multimedia :: Graphics",
    ],
    keywords=[
        "gradient",
        "css",
        "svg",
        "animation",
        "design",
        "ai",
        "gemini",
        "mcp",
    ],
)
