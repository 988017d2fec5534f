from setuptools import setup, find_packages

with open('requirements.txt') as f:
    required = f.read().splitlines()

setup(
    name='hexants',
    version='0.1',
    packages=find_packages(exclude=['tests']),
    py_modules=['replay_transcript'],
    description='Greedy beacon-network bot for the hexagonal ants resource game.',
    long_description=open('README.md').read(),
    long_description_content_type='text/markdown',
    install_requires=required,
    extras_require={
        'test': ['pytest'],
    },
    entry_points={
        'console_scripts': [
            'hexants-bot=hexants.bot:main',
        ],
    },
)
