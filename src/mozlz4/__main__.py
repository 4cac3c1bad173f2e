from mozlz4.cli import main

raise SystemExit(main())
