from setuptools import setup, find_namespace_packages

about = {}
with open("keymapex/_version.py") as version_file:
    exec(version_file.read(), about)
    
def readme():
    with open('README.rst') as readme_file:
        return readme_file.read()

setup(name='KeymapEx',
      version=about["__version__"],
      description='Editor for the extended USB to XT/AT keymap of a keyboard adapter',
      long_description=readme(),
      keywords='keymap keyboard usb hid xt at editor',
      packages=find_namespace_packages(include=["keymapex", "keymapex.*"]),
      python_requires='>=3.8',
      install_requires=[
          'PyQt5',
          'requests',
          'PyYAML',
          'platformdirs',
      ],
      extras_require={
          'test': ['pytest'],
      },
      entry_points={
          'gui_scripts': ['keymapex=keymapex.main_app:main'],
      })
