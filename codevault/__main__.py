from codevault.cli.main import main

raise SystemExit(main())
