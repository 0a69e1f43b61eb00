import sys

from kamailio_exporter.cli import main

sys.exit(main())
