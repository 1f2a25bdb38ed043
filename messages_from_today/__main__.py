from messages_from_today.cli import main

main()
