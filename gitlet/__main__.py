from gitlet.cli import main

raise SystemExit(main())
