from jvp_ui.cli import main

main()
