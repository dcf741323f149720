from deepseek_hello.cli import main

raise SystemExit(main())
