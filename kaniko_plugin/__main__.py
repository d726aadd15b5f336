from kaniko_plugin.cli import main


main()
