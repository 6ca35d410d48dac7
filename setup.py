import re
from pathlib import Path
from setuptools import setup, find_packages

ROOT = Path(__file__).resolve().parent


def read_readme() -> str:
    readme_path = ROOT / "README.md"
    return readme_path.read_text(encoding="utf-8") if readme_path.exists() else ""


def read_version() -> str:
    engine = (ROOT / "pdfdocpass" / "engine.py").read_text(encoding="utf-8")
    return re.search(r'ENGINE_VERSION = "([^"]+)"', engine).group(1)


setup(
    name="pdfdocpass",
    version=read_version(),
    packages=find_packages(exclude=("tests", "tests.*")),
    install_requires=[
        "cryptography>=43.0.0",
    ],
    python_requires=">=3.10",
    description="PDFDocEncoding password conversion for legacy PDF security handlers",
    long_description=read_readme(),
    long_description_content_type="text/markdown",
)
