from numstat.cli import main

main()
