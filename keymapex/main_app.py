import argparse
import logging
import sys

from keymapex.host import KeymapExHost


def main():
    parser = argparse.ArgumentParser(
                    prog='KeymapEx',
                    usage='%(prog)s [options]',
                    description='Edit the extended keymap of your keyboard adapter')
    parser.add_argument('--debug', type=int, default=0, choices=[0, 1, 2],
                        help='Set debug level: 0 (no debug), 1 (basic debug), 2 (detailed debug)')
    parser.add_argument('--host', help='Device address, overrides the configured device url for this run')
    parser.add_argument('--mock', default=False, action='store_true',
                        help='Do not connect to a device, edit an emulated keymap instead')
    args = parser.parse_args()

    if args.debug > 1:
        # requests/urllib3 connection details
        logging.getLogger("urllib3").setLevel(logging.DEBUG)

    app = KeymapExHost(logging.DEBUG if args.debug > 0 else logging.INFO, args.host, args.mock)
    sys.exit(app.exec_())
