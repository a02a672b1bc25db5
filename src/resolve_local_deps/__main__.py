from resolve_local_deps.cli.app import main

main()
