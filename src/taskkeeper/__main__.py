from taskkeeper.cli.main import main

main()
