from cadentis.app.cli import main

raise SystemExit(main())
