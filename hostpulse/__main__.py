from hostpulse.cli import main

main()
