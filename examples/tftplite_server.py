#!/usr/bin/env python
# vim: ts=4 sw=4 et ai:
# -*- coding: utf8 -*-

import sys
import logging
import time

from optparse import OptionParser

import tftplite
from tftplite.shared import DEF_TFTP_PORT, POLL_INTERVAL

log = logging.getLogger('tftplite')
log.setLevel(logging.INFO)

# console handler
handler = logging.StreamHandler()
handler.setLevel(logging.DEBUG)
default_formatter = logging.Formatter('[%(asctime)s] %(message)s')
handler.setFormatter(default_formatter)
log.addHandler(handler)

def main():
    usage = "usage: %prog [options]"
    parser = OptionParser(usage=usage)
    parser.add_option('-i',
                      '--ip',
                      type='string',
                      help='ip address to bind to (default: 127.0.0.1)',
                      default='127.0.0.1')
    parser.add_option('-p',
                      '--port',
                      type='int',
                      help=f'local port to use (default: {DEF_TFTP_PORT})',
                      default=DEF_TFTP_PORT)
    parser.add_option('-r',
                      '--root',
                      type='string',
                      help='path to serve from and receive into (default: ./tftpboot)',
                      default='./tftpboot')
    parser.add_option('-n',
                      '--interval',
                      type='float',
                      help=f'polling interval in seconds (default: {POLL_INTERVAL})',
                      default=POLL_INTERVAL)
    parser.add_option('-d',
                      '--debug',
                      action='store_true',
                      default=False,
                      help='upgrade logging from info to debug')
    parser.add_option('-q',
                      '--quiet',
                      action='store_true',
                      default=False,
                      help="downgrade logging from info to warning")
    options, args = parser.parse_args()

    if args:
        parser.error("Incorrect number of arguments")

    if options.debug and options.quiet:
        sys.stderr.write("The --debug and --quiet options are "
                         "mutually exclusive.\n")
        parser.print_help()
        sys.exit(1)

    if options.debug:
        log.setLevel(logging.DEBUG)
        # increase the verbosity of the formatter
        debug_formatter = logging.Formatter('[%(asctime)s%(msecs)03d] %(levelname)s [%(name)s:%(lineno)s] %(message)s')
        handler.setFormatter(debug_formatter)
    elif options.quiet:
        log.setLevel(logging.WARNING)

    try:
        server = tftplite.TftpServer(options.root, options.ip, options.port)
    except (tftplite.TftpException, FileNotFoundError) as err:
        sys.stderr.write("%s\n" % str(err))
        sys.exit(1)

    if server.state == tftplite.State.ERROR:
        sys.stderr.write(f"Could not bind {options.ip}:{options.port}\n")
        sys.exit(1)

    poller = tftplite.TftpPoller(server, options.interval)
    poller.start()

    try:
        while poller.is_alive():
            time.sleep(1)
    except KeyboardInterrupt:
        pass
    finally:
        poller.stop()
        server.close()
        log.info(f"{server.file_count} files received")

if __name__ == '__main__':
    main()
