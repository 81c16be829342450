from tracktime.cli import main

main()
