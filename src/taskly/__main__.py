from taskly.cli.main import main

main()
