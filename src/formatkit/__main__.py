from formatkit.cli import main

main()
