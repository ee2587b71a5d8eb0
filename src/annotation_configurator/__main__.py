from annotation_configurator.cli import main

main()
