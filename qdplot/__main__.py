from qdplot.cli import main

raise SystemExit(main())
