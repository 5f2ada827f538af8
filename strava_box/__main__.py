from .cli.publish import main

main()
