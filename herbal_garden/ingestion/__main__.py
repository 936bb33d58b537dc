import sys

from herbal_garden.ingestion.cli import main

sys.exit(main())
