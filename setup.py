from setuptools import setup, find_packages

setup(
    name="cadence-scheduler",
    version="1.0.0",
    description="A quarter scheduling system that books recurring course sessions by cadence",
    package_dir={"": "src"},
    packages=find_packages(where="src"),
    install_requires=[
        "numpy>=1.20.0",
        "pandas>=1.3.0",
        "openpyxl>=3.0.0",
        "python-docx>=1.0.0",
        "gspread>=5.0.0",
        "google-auth>=2.0.0",
        "waitress>=3.0.2"
    ],
    extras_require={
        "web": ["flask>=2.3.0", "flask-cors>=4.0.0"],
        "test": ["pytest>=7.0.0", "flask>=2.3.0", "flask-cors>=4.0.0"],
    },
    python_requires=">=3.11",
)
