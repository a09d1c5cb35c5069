from setuptools import setup

setup(name='triodos_ynab',
      version='0.1',
      description='Copy Triodos Bank transactions into YNAB',
      license='GPLv3',
      packages=['triodos_ynab', 'triodos_ynab.bank'],
      python_requires='>=3.8',
      install_requires=[
          'atomicwrites',
          'click',
          'python-dotenv',
          'requests',
          'rncryptor',
          'schwifty',
          'selenium>=4',
          'tabulate',
      ],
      extras_require={
          'test': ['pytest'],
      },
      entry_points={
          'console_scripts': ['triodos-ynab=triodos_ynab.cli:cli'],
      },
      zip_safe=False)
