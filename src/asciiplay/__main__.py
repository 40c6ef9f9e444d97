from asciiplay.cli import main

main()
