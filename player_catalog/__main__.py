from player_catalog.apps.cli import main

if __name__ == "__main__":
    main()
