from setuptools import setup, find_packages
import re

# Read version from coda_mcp/__init__.py
with open('coda_mcp/__init__.py') as f:
    version = re.search(r'^__version__ = ["\']([^"\']+)["\']', f.read(), re.MULTILINE).group(1)

setup(
    name='coda-mcp',
    version=version,
    packages=find_packages(exclude=['tests', 'tests.*']),
    python_requires='>=3.10',
    install_requires=[
        'mcp>=1.20.0,<2',
        'httpx>=0.27',
        'pydantic>=2.5',
        'python-dotenv',
        'click>=8.0',
        'PyYAML',
    ],
    extras_require={
        'test': ['pytest>=7.0'],
    },
    entry_points={
        'console_scripts': [
            'coda-mcp=coda_mcp.cli.__main__:main',
            'coda-mcp-server=coda_mcp.mcp.server:run_server',
        ],
    },
    author='CLI Developer',
    description='Coda MCP - SDK, CLI, and MCP server for the Coda API.',
    long_description=open('README.md').read(),
    long_description_content_type='text/markdown',
)
