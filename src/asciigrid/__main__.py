from asciigrid.cli import main

main()
