from wolweb.main import main

raise SystemExit(main())
