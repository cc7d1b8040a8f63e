from snake_arena.cli import main

main()
