from htmx_starter.pipeline import main

main()
