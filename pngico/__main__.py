import sys

from pngico.main import main

sys.exit(main())
