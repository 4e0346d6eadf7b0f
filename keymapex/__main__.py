import sys
import os

# Get absolute path of the current file (__main__.py)
current_file = os.path.abspath(__file__)
# Get the parent directory (the project root)
parent_dir = os.path.abspath(os.path.join(os.path.dirname(current_file), ".."))

# Detect if the script is being run directly
if __name__ == "__main__" and parent_dir not in sys.path:
    sys.path.insert(0, parent_dir)

from keymapex.main_app import main

main()
