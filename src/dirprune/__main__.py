from dirprune.cli import main

raise SystemExit(main())
