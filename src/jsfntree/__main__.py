from jsfntree.cli import main

raise SystemExit(main())
