from bintree.demo import main

raise SystemExit(main())
