import sys

from asteroid_field.main import main

sys.exit(main())
