from at_review.cli import main

raise SystemExit(main())
