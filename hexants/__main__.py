from hexants.bot import main

raise SystemExit(main())
