from fractree.viewer import main

main()
