# emoji_picker/data - bundled corpus asset (emoji_data.json)
