from rail_departures.main import cli_main

cli_main()
