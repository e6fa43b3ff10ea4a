# setup.py
import os
from setuptools import setup, find_packages

# Function to read the requirements.txt file
def parse_requirements(filename="requirements.txt"):
    with open(os.path.join(os.path.dirname(__file__), filename), 'r') as f:
        return [line.strip() for line in f if line.strip() and not line.startswith('#')]

# Read the contents of your README file for long description
try:
    with open(os.path.join(os.path.dirname(__file__), 'README.md'), encoding='utf-8') as f:
        long_description = f.read()
except FileNotFoundError:
    long_description = "Posts AI-generated code review findings as inline pull request comments."

# Get version from package __init__.py
version = {}
with open(os.path.join(os.path.dirname(__file__), "src", "pr_review_commenter", "__init__.py")) as fp:
    exec(fp.read(), version)

setup(
    name='pr-review-commenter',
    version=version['__version__'],
    description='Requests an AI code review for a pull request and posts the findings as inline review comments.',
    long_description=long_description,
    long_description_content_type='text/markdown',
    license='MIT',
    package_dir={'': 'src'},
    packages=find_packages(where='src', exclude=['tests*', '*.tests', '*.tests.*']),
    package_data={'pr_review_commenter': ['prompts/*.txt']},
    include_package_data=True,
    install_requires=parse_requirements(),
    extras_require={
        'test': ['pytest'],
    },
    python_requires='>=3.9',  # importlib.resources.files
    entry_points={
        'console_scripts': [
            'pr-review-commenter = pr_review_commenter.main:main_cli',
        ],
    },
    classifiers=[
        'Development Status :: 3 - Alpha',
        'Intended Audience :: Developers',
        'License :: OSI Approved :: MIT License',
        'Operating System :: OS Independent',
        'Programming Language :: Python :: 3',
        'Programming Language :: Python :: 3.9',
        'Programming Language :: Python :: 3.10',
        'Programming Language :: Python :: 3.11',
        'Programming Language :: Python :: 3.12',
        'Topic :: Software Development :: Quality Assurance',
        'Topic :: Scientific/Engineering :: Artificial Intelligence',
    ],
    keywords='github actions ci code review llm litellm gemini openai ai pull request pr reviewer',
)
