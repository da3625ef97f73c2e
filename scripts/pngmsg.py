#!/usr/bin/env python3
'''
Hide messages inside PNG files

 $ pngmsg.py encode image.png ruSt 'this is a secret'
 $ pngmsg.py decode image.png ruSt
 $ pngmsg.py remove image.png ruSt
 $ pngmsg.py print image.png
'''
import logging
import os
import sys

from pngchunk.commands import main


logging.basicConfig(level=logging.DEBUG if 'DEBUG' in os.environ else logging.INFO)


if __name__ == '__main__':
    sys.exit(main(sys.argv))
